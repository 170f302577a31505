"""Shared API constants."""

# Object store prefix for PDF menus: happyHourMenu/<entryId>.pdf (legacy: happyHourMenu/<barName>/<entryId>.pdf)
MENU_PREFIX = "happyHourMenu"
PDF_MEDIA_TYPE = "application/pdf"
PDF_CACHE_CONTROL = "public, max-age=3600"

# Defaults filled in when the analysis service leaves fields out
DEFAULT_HAPPY_HOUR_NAME = "Happy Hour"
DEFAULT_DEAL_ITEM = "Unknown Item"
DEFAULT_DEAL_DESCRIPTION = "No description available"
DEFAULT_DEAL_TEXT = "Price not specified"

# Dashboard cards list at most this many drinks per happy hour
SUMMARY_DRINKS_LIMIT = 3
