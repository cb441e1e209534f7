"""Business identity and brand palette shared by every outgoing email."""

import re

BRAND_COLORS = {
    "primary": "#FD5A1E",
    "secondary": "#F5F5F5",
    "dark": "#000000",
    "accent": "#4d4d4d",
    "success": "#22c55e",
    "warning": "#eab308",
    "error": "#ef4444",
}

BUSINESS_INFO = {
    "name": "AMP Vending",
    "legal_name": "AMP Design and Consulting LLC",
    "street": "4120 Dale Rd Ste J8 1005",
    "city": "Modesto",
    "state": "CA",
    "zip_code": "95354",
    "phone": "(209) 403-5450",
    "email": "ampdesignandconsulting@gmail.com",
    "website": "https://www.ampvendingmachines.com",
    "logo": "https://www.ampvendingmachines.com/images/logo/AMP_logo.png",
    "tagline": "Premium Vending Solutions for Modern Workplaces",
}

CATEGORY_EMOJIS = {
    "Question": "❓",
    "Suggestion": "💡",
    "Compliment": "👏",
    "Complaint": "⚠️",
    "Technical Issue": "🔧",
    "Product Request": "📦",
}
DEFAULT_CATEGORY_EMOJI = "📝"

CATEGORY_COLORS = {
    "Complaint": BRAND_COLORS["error"],
    "Technical Issue": BRAND_COLORS["warning"],
    "Question": BRAND_COLORS["primary"],
    "Suggestion": BRAND_COLORS["success"],
    "Compliment": BRAND_COLORS["success"],
    "Product Request": BRAND_COLORS["primary"],
}


def category_emoji(category: str) -> str:
    return CATEGORY_EMOJIS.get(category, DEFAULT_CATEGORY_EMOJI)


def category_color(category: str) -> str:
    return CATEGORY_COLORS.get(category, BRAND_COLORS["primary"])


def digits_only(value: str) -> str:
    """Strip everything but digits (tel: links)."""
    return re.sub(r"[^0-9]", "", value or "")
