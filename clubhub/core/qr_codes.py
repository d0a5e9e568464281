"""
Signed QR payloads for tickets and subscriptions.

A QR code carries a compact JSON object with a short signature (``sig``)
so scanners can reject forged or edited codes without a database lookup.
Older tickets carry only their id; those are still accepted by the scanner.
"""

import base64
import hashlib
import io
import json
import logging
from typing import Any, Dict, Optional

import qrcode
from PIL import Image
from qrcode.constants import ERROR_CORRECT_H

from clubhub.config import settings

logger = logging.getLogger(__name__)

QR_IMAGE_WIDTH = 300
QR_DARK_COLOR = "#0A165B"
QR_LIGHT_COLOR = "#FFFFFF"


def _compact_json(data: Dict[str, Any]) -> str:
    return json.dumps(data, separators=(",", ":"), ensure_ascii=False)


def _text(value: Optional[Any], limit: int) -> str:
    return str(value or "")[:limit]


class QRCodeService:
    def __init__(self, secret: Optional[str] = None):
        self.secret = secret or settings.qr_code_secret

    def sign(self, data: Dict[str, Any]) -> str:
        """First 16 hex chars of sha256(payload json + secret)"""
        digest = hashlib.sha256((_compact_json(data) + self.secret).encode("utf-8"))
        return digest.hexdigest()[:16]

    def ticket_payload(self, ticket: Dict[str, Any], event: Dict[str, Any], tier: Dict[str, Any]) -> Dict[str, Any]:
        data = {
            "tid": ticket["id"],
            "eid": ticket.get("event_id") or event.get("id"),
            "et": _text(event.get("title"), 50),
            "ed": event.get("date") or "",
            "pn": _text(ticket.get("purchaser_name"), 30),
            "pe": _text(ticket.get("purchaser_email"), 50),
            "tn": _text(tier.get("name"), 20),
            "tp": tier.get("price") or 0,
            "ca": ticket.get("created_at") or "",
        }
        return {**data, "sig": self.sign(data)}

    def subscription_payload(self, subscription: Dict[str, Any]) -> Dict[str, Any]:
        data = {
            "sid": subscription["id"],
            "pn": _text(subscription.get("purchaser_name"), 30),
            "ps": _text(subscription.get("purchaser_surname"), 30),
            "pe": _text(subscription.get("purchaser_email"), 50),
            "vf": subscription.get("valid_from") or "",
            "vt": subscription.get("valid_to") or "",
            "ca": subscription.get("created_at") or "",
        }
        return {**data, "sig": self.sign(data)}

    def parse(self, qr_data: str) -> Optional[Dict[str, Any]]:
        """Decode scanned text; None unless it is JSON with a valid signature"""
        try:
            parsed = json.loads(qr_data)
        except (TypeError, ValueError):
            return None
        if not isinstance(parsed, dict):
            return None
        signature = parsed.get("sig")
        unsigned = {k: v for k, v in parsed.items() if k != "sig"}
        if not signature or self.sign(unsigned) != signature:
            logger.warning("Rejected QR code with invalid signature")
            return None
        return parsed

    @staticmethod
    def is_ticket(data: Dict[str, Any]) -> bool:
        return "tid" in data and "eid" in data

    @staticmethod
    def is_subscription(data: Dict[str, Any]) -> bool:
        return "sid" in data and "vf" in data and "vt" in data

    def image_data_url(self, content: Any) -> str:
        """Render a payload (dict) or plain id (str) as a PNG data URL"""
        text = content if isinstance(content, str) else _compact_json(content)
        qr = qrcode.QRCode(error_correction=ERROR_CORRECT_H, box_size=10, border=2)
        qr.add_data(text)
        qr.make(fit=True)
        image = qr.make_image(fill_color=QR_DARK_COLOR, back_color=QR_LIGHT_COLOR).get_image()
        image = image.resize((QR_IMAGE_WIDTH, QR_IMAGE_WIDTH), Image.NEAREST)
        buffer = io.BytesIO()
        image.save(buffer, format="PNG")
        return "data:image/png;base64," + base64.b64encode(buffer.getvalue()).decode("ascii")

    def ticket_qr_code(self, ticket: Dict[str, Any], event: Dict[str, Any], tier: Dict[str, Any]) -> str:
        return self.image_data_url(self.ticket_payload(ticket, event, tier))

    def subscription_qr_code(self, subscription: Dict[str, Any]) -> str:
        return self.image_data_url(self.subscription_payload(subscription))


qr_code_service = QRCodeService()
