from clubhub.config.settings import settings

__all__ = ["settings"]
