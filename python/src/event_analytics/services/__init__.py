"""
Service layer: GA4 access, report caching and event count aggregation.
"""
