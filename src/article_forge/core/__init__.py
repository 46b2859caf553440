# ABOUTME: Business logic and orchestration layer
# ABOUTME: Pipeline Stage 3: Extracted documents and stored originals → Article store records

"""
Core Layer: Pipeline orchestration

This layer handles:
- Oldest-cohort selection and idempotent ingestion
- Per-article enrichment with failure isolation
- Run reports of per-item outcomes

Data Flow: acquisition/ + enrichment/ → Pipeline services → persistence/
"""

from .enrichment import EnrichmentOrchestrator
from .ingestion import IngestionService
from .models import ItemOutcome, OutcomeStatus, RunReport

__all__ = [
    "EnrichmentOrchestrator",
    "IngestionService",
    "ItemOutcome",
    "OutcomeStatus",
    "RunReport",
]
