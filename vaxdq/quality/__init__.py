"""Record-level data quality rules.

Two classification lenses coexist and are deliberately kept apart:
``get_severity`` (triage, filtering, summary strip) and
``risk_class_from_record`` (row highlighting).
"""
