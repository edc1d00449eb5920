from app.normalization.fields import build_template_fields, date_only, full_zone, invert_title

__all__ = ["build_template_fields", "date_only", "full_zone", "invert_title"]
