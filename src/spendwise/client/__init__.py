"""Insight service client."""
from .insight_client import InsightClient

__all__ = ["InsightClient"]
