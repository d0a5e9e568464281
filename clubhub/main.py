import logging
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter, _rate_limit_exceeded_handler
from slowapi.util import get_remote_address
from slowapi.errors import RateLimitExceeded

from clubhub.config import settings
from clubhub.modules.auth import routes as auth_routes
from clubhub.modules.teams import routes as teams_routes
from clubhub.modules.events import routes as events_routes
from clubhub.modules.tickets import routes as tickets_routes
from clubhub.modules.validation import routes as validation_routes
from clubhub.modules.subscription_types import routes as subscription_types_routes
from clubhub.modules.subscriptions import routes as subscriptions_routes
from clubhub.modules.coupons import routes as coupons_routes
from clubhub.modules.checkout import routes as checkout_routes
from clubhub.modules.webhooks import routes as webhooks_routes
from clubhub.modules.shop import routes as shop_routes
from clubhub.modules.uploads import routes as uploads_routes
from clubhub.modules.posts import routes as posts_routes
from clubhub.modules.fixtures import routes as fixtures_routes
from clubhub.modules.standings import routes as standings_routes
from clubhub.modules.players import routes as players_routes
from clubhub.modules.fans import routes as fans_routes
from clubhub.modules.marketing import routes as marketing_routes
from clubhub.modules.stats import routes as stats_routes
from clubhub.modules.email_templates import routes as email_templates_routes

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
    datefmt="%Y-%m-%dT%H:%M:%SZ",
)
logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address, default_limits=[settings.rate_limit])
app = FastAPI(
    title=settings.app_name,
    debug=settings.debug,
    redirect_slashes=False,
)
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.exception("Unhandled exception: %s", exc)
    if settings.is_production:
        return JSONResponse(status_code=500, content={"detail": "Internal server error"})
    return JSONResponse(status_code=500, content={"detail": str(exc)})


class SecurityHeadersMiddleware:
    def __init__(self, app):
        self.app = app

    async def __call__(self, scope, receive, send):
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        async def send_with_headers(message):
            if message["type"] == "http.response.start":
                message.setdefault("headers", [])
                message["headers"].extend([
                    (b"X-Content-Type-Options", b"nosniff"),
                    (b"X-Frame-Options", b"DENY"),
                    (b"X-XSS-Protection", b"1; mode=block"),
                    (b"Referrer-Policy", b"strict-origin-when-cross-origin"),
                ])
            await send(message)

        await self.app(scope, receive, send_with_headers)


app.add_middleware(SecurityHeadersMiddleware)
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.get_cors_origins_list(),
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Every module router lives under /api
API_ROUTERS = (
    auth_routes.router,
    teams_routes.router,
    events_routes.router,
    tickets_routes.router,
    validation_routes.router,
    subscription_types_routes.router,
    subscriptions_routes.router,
    coupons_routes.router,
    checkout_routes.router,
    webhooks_routes.router,
    shop_routes.router,
    uploads_routes.router,
    posts_routes.router,
    fixtures_routes.router,
    fixtures_routes.matches_router,
    standings_routes.router,
    players_routes.router,
    fans_routes.router,
    marketing_routes.router,
    stats_routes.router,
    email_templates_routes.router,
)
for api_router in API_ROUTERS:
    app.include_router(api_router, prefix="/api")


@app.on_event("startup")
async def startup_event():
    logger.info(f"{settings.app_name} startup ({settings.environment})")
    if not settings.stripe_webhook_secret:
        logger.warning("STRIPE_WEBHOOK_SECRET is not set; Stripe webhooks will be rejected")
    if not settings.resend_api_key:
        logger.warning("RESEND_API_KEY is not set; confirmation emails will fail")


@app.on_event("shutdown")
async def shutdown_event():
    logger.info(f"{settings.app_name} shutdown")


@app.get("/")
async def root():
    return {"message": f"{settings.club_name} club API", "status": "healthy"}


@app.get("/health")
@limiter.exempt
async def health():
    return {"status": "healthy"}


@app.get("/ready")
@limiter.exempt
async def ready():
    """Readiness probe; reports which external services are configured"""
    return {
        "status": "ready",
        "database": bool(settings.supabase_url and settings.supabase_key),
        "payments": bool(settings.stripe_secret_key),
        "email": bool(settings.resend_api_key),
        "storage": "s3" if settings.s3_configured else "supabase",
    }
