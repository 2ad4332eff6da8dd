"""
Infrastructure module initialization.
"""
from .tomtom_client import TomTomClient
from .routing import RouteResolver
from .flow import FlowFetcher
from .incidents import IncidentFetcher, parse_incidents
from .repositories import SqlTrafficSampleRepository
from .retry import RetryPolicy, call_with_retry

__all__ = [
    "TomTomClient",
    "RouteResolver",
    "FlowFetcher",
    "IncidentFetcher",
    "parse_incidents",
    "SqlTrafficSampleRepository",
    "RetryPolicy",
    "call_with_retry",
]
