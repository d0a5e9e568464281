"""HTML pages for printable tickets and season passes, rendered to PDF by core.browser."""

from typing import Any, Dict, Optional

from jinja2 import DictLoader, Environment, select_autoescape

from clubhub.core.dates import parse_date

MONTHS_LT = [
    "Sausio", "Vasario", "Kovo", "Balandžio", "Gegužės", "Birželio",
    "Liepos", "Rugpjūčio", "Rugsėjo", "Spalio", "Lapkričio", "Gruodžio",
]

_BASE_STYLE = """
    html, body { margin: 0; padding: 0; }
    body {
      width: 1600px; height: 700px;
      background: linear-gradient(135deg, #0A165B 0%, #1a237e 100%);
      font-family: -apple-system, Segoe UI, Roboto, Inter, Arial, sans-serif;
      color: #fff;
    }
    .wrap { position: relative; width: 100%; height: 100%; }
    .left { position: absolute; left: 120px; right: 560px; top: 90px; }
    .label { font-size: 18px; opacity: 0.8; margin-bottom: 8px; }
    .title { font-weight: 800; font-size: 42px; margin: 18px 0 36px; }
    .value-lg { font-weight: 700; font-size: 32px; margin: 0 0 28px; }
    .row { display: flex; gap: 64px; }
    .col { flex: 1; min-width: 280px; }
    .value { font-weight: 700; font-size: 30px; margin: 0; }
    .value-sm { font-size: 16px; margin-top: 8px; }
    .qr { position: absolute; right: 140px; top: 140px; width: 300px; }
    .qr-card { background: #fff; padding: 10px; border-radius: 12px; display: inline-block; }
    .qr img { display: block; width: 300px; height: 300px; }
    .qr .label { color: #fff; opacity: 1; margin: 12px 0 4px; }
"""

TEMPLATES = {
    "ticket.html": """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="color-scheme" content="light" />
  <style>{{ style | safe }}</style>
</head>
<body>
  <div class="wrap">
    <div class="left">
      <div class="label">Rungtynės</div>
      <div class="title">{{ title }}</div>

      <div class="label">Vieta</div>
      <div class="value-lg">{{ location }}</div>

      <div class="row">
        <div class="col">
          <div class="label">Laikas</div>
          <div class="value">{{ date_text }}</div>
        </div>
        <div class="col">
          <div class="label">Bilieto tipas ir kaina</div>
          <div class="value">{{ price_text }}</div>
        </div>
      </div>

      <div style="height: 24px"></div>
      <div class="label">Pirkėjas</div>
      <div class="value" style="font-size: 26px;">{{ purchaser_name }}</div>
      <div class="value-sm">{{ purchaser_email }}</div>
    </div>

    <div class="qr">
      <div class="qr-card"><img src="{{ qr_code_url }}" alt="QR" /></div>
      <div class="label">QR kodas</div>
      <div class="value-sm">Skenuokite prie įėjimo</div>
    </div>
  </div>
</body>
</html>""",
    "subscription.html": """<!doctype html>
<html>
<head>
  <meta charset="utf-8" />
  <meta name="color-scheme" content="light" />
  <style>{{ style | safe }}</style>
</head>
<body>
  <div class="wrap">
    <div class="left">
      <div class="label">Sezono abonementas</div>
      <div class="title">{{ title }}</div>

      <div class="row">
        <div class="col">
          <div class="label">Galioja nuo</div>
          <div class="value">{{ valid_from }}</div>
        </div>
        <div class="col">
          <div class="label">Galioja iki</div>
          <div class="value">{{ valid_to }}</div>
        </div>
      </div>

      <div style="height: 24px"></div>
      <div class="label">Savininkas</div>
      <div class="value" style="font-size: 26px;">{{ purchaser_name }}</div>
      <div class="value-sm">{{ purchaser_email }}</div>
    </div>

    <div class="qr">
      <div class="qr-card"><img src="{{ qr_code_url }}" alt="QR" /></div>
      <div class="label">QR kodas</div>
      <div class="value-sm">Skenuokite prie įėjimo</div>
    </div>
  </div>
</body>
</html>""",
}

env = Environment(loader=DictLoader(TEMPLATES), autoescape=select_autoescape(["html"]))


def month_lt(value: Any) -> str:
    """'2025-05-17' -> 'Gegužės 17d'"""
    parsed = parse_date(value)
    if not parsed:
        return ""
    return f"{MONTHS_LT[parsed.month - 1]} {parsed.day}d"


def format_date_lt(value: Any) -> str:
    parsed = parse_date(value)
    return parsed.isoformat() if parsed else ""


def render_ticket_html(ticket: Dict[str, Any], event: Dict[str, Any], tier: Optional[Dict[str, Any]]) -> str:
    date_text = month_lt(event.get("date"))
    if event.get("time"):
        date_text = f"{date_text}, {event['time']}"
    price_text = f"{tier['name']} / €{float(tier.get('price') or 0):.0f}" if tier else "N/A"
    return env.get_template("ticket.html").render(
        style=_BASE_STYLE,
        title=event.get("title") or "Bilietas",
        location=event.get("location") or "",
        date_text=date_text,
        price_text=price_text,
        purchaser_name=ticket.get("purchaser_name") or "",
        purchaser_email=ticket.get("purchaser_email") or "",
        qr_code_url=ticket.get("qr_code_url") or "",
    )


def render_subscription_html(subscription: Dict[str, Any], title: Optional[str] = None) -> str:
    name = " ".join(filter(None, [subscription.get("purchaser_name"), subscription.get("purchaser_surname")]))
    return env.get_template("subscription.html").render(
        style=_BASE_STYLE,
        title=title or "Abonementas",
        valid_from=format_date_lt(subscription.get("valid_from")),
        valid_to=format_date_lt(subscription.get("valid_to")),
        purchaser_name=name,
        purchaser_email=subscription.get("purchaser_email") or "",
        qr_code_url=subscription.get("qr_code_url") or "",
    )
