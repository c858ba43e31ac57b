"""LLM processing module."""
from .models import TransactionRecord, Insight, MonthlyStat, CategoryTotal
from .insight_generator import InsightGenerator
from .aggregator import Aggregator

__all__ = [
    "TransactionRecord",
    "Insight",
    "MonthlyStat",
    "CategoryTotal",
    "InsightGenerator",
    "Aggregator"
]
