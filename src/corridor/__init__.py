"""
Corridor traffic polling: geometry, provider fetches, geofencing and aggregation.
"""
