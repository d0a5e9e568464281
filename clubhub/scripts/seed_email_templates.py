"""
Seed Email Templates Script
This script creates or updates the email templates the notification service
looks up by name. Existing subjects and bodies are only overwritten with --force,
so edits made from the dashboard survive a re-run.
"""

import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent.parent
sys.path.insert(0, str(project_root))

from clubhub.core.notifications import (
    TICKET_CONFIRMATION, SUBSCRIPTION_CONFIRMATION, SHOP_ORDER_CONFIRMATION,
    SHOP_ORDER_ADMIN_NOTIFICATION, SHOP_ORDER_SHIPPED
)
from clubhub.database.supabase_client import get_service_supabase
from supabase import Client
import logging

logging.basicConfig(level=logging.INFO)
logger = logging.getLogger(__name__)

ORDER_TABLE = (
    "<table style=\"width: 100%; border-collapse: collapse;\">"
    "<tr><th align=\"left\">Prekė</th><th align=\"left\">Kiekis</th>"
    "<th align=\"left\">Kaina</th><th align=\"left\">Suma</th></tr>"
    "{{order_items}}"
    "</table>"
)

DEFAULT_TEMPLATES = [
    {
        "name": TICKET_CONFIRMATION,
        "subject": "Jūsų bilietas: {{event_title}}",
        "body_html": (
            "<p>Sveiki, {{purchaser_name}},</p>"
            "<p>Ačiū, kad įsigijote bilietą į <strong>{{event_title}}</strong>.</p>"
            "<p>{{event_date}} {{event_time}}, {{event_location}}</p>"
            "<p>Bilietą rasite prisegtame PDF faile. Parodykite QR kodą prie įėjimo.</p>"
        ),
    },
    {
        "name": SUBSCRIPTION_CONFIRMATION,
        "subject": "Jūsų sezono abonementas",
        "body_html": (
            "<p>Sveiki, {{purchaser_name}},</p>"
            "<p>Jūsų abonementas galioja: <strong>{{validity_period}}</strong>.</p>"
            "<p>Abonementą rasite prisegtame PDF faile.</p>"
        ),
    },
    {
        "name": SHOP_ORDER_CONFIRMATION,
        "subject": "Užsakymas {{order_number}} gautas",
        "body_html": (
            "<p>Sveiki, {{customer_name}},</p>"
            "<p>Gavome jūsų užsakymą <strong>{{order_number}}</strong>.</p>"
            + ORDER_TABLE +
            "<p>Iš viso: {{total_amount}}</p>"
            "<p>Pristatymo adresas: {{delivery_address}}</p>"
        ),
    },
    {
        "name": SHOP_ORDER_ADMIN_NOTIFICATION,
        "subject": "Naujas užsakymas {{order_number}}",
        "body_html": (
            "<p>Naujas užsakymas <strong>{{order_number}}</strong>.</p>"
            "<p>{{customer_name}}, {{customer_email}}, {{customer_phone}}</p>"
            + ORDER_TABLE +
            "<p>Iš viso: {{total_amount}}</p>"
            "<p>Pristatymo adresas: {{delivery_address}}</p>"
        ),
    },
    {
        "name": SHOP_ORDER_SHIPPED,
        "subject": "Užsakymas {{order_number}} išsiųstas",
        "body_html": (
            "<p>Sveiki, {{customer_name}},</p>"
            "<p>Jūsų užsakymas <strong>{{order_number}}</strong> išsiųstas.</p>"
            "<p>Siuntos sekimo numeris: {{tracking_number}}</p>"
        ),
    },
]


def seed_templates(supabase: Client, force: bool = False):
    """Create missing templates; with force also overwrite existing ones"""
    logger.info("Seeding email templates...")

    created_count = 0
    updated_count = 0

    for template in DEFAULT_TEMPLATES:
        try:
            existing = supabase.table("email_templates")\
                .select("id")\
                .eq("name", template["name"])\
                .execute()

            if existing.data:
                if not force:
                    logger.debug(f"Kept existing template: {template['name']}")
                    continue
                supabase.table("email_templates")\
                    .update({
                        "subject": template["subject"],
                        "body_html": template["body_html"]
                    })\
                    .eq("name", template["name"])\
                    .execute()
                updated_count += 1
                logger.debug(f"Updated template: {template['name']}")
            else:
                supabase.table("email_templates").insert(template).execute()
                created_count += 1
                logger.debug(f"Created template: {template['name']}")
        except Exception as e:
            logger.error(f"Error processing template {template['name']}: {e}")

    logger.info(f"Email templates seeded: {created_count} created, {updated_count} updated")
    return created_count + updated_count


def main():
    """Main function to seed email templates"""
    try:
        supabase = get_service_supabase()
        seed_templates(supabase, force="--force" in sys.argv[1:])
        logger.info("Seeding completed successfully!")
    except Exception as e:
        logger.error(f"Error during seeding: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
