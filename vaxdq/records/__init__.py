"""Immunization record model and record-source loading.

Every engine component consumes ``ImmunizationRecord`` objects; none of them
knows whether the collection came from a local JSON file or a remote URL.
"""
