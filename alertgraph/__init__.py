"""
Alert Graph Engine

Turns one security alert's entity network (processes, files, sockets
joined by timestamped actions) into a deterministic 2D layout.

LAYER STRUCTURE:
================

1. INGESTION LAYER (ingestion/)
   - Responsibility: Fetch alert metadata and networks from the data service
   - Outputs: FetchResult (raw JSON or explicit failure)
   - MUST NOT: Validate, retry, or raise

2. NORMALIZATION LAYER (normalization/)
   - Responsibility: Validate raw records at the boundary
   - Outputs: NetworkPayload (valid Node/Edge + quarantined records)
   - MUST NOT: Compute layout

3. TEMPORAL LAYER (temporal/)
   - Responsibility: Injectable, locale-free edge time parsing
   - Outputs: ParsedTime | UnparseableTime, a total chronological order

4. CORE GRAPH LAYER (core/)
   - Responsibility: Rank layout, pair-keyed edge index, visibility filter
   - Outputs: AlertGraphModel, VisibleGraph
   - MUST NOT: Decide presentation, hold selection state

5. OBSERVABILITY LAYER (observability/)
   - Responsibility: Logging setup, append-only audit trail

CONSTRAINTS ENFORCED:
=====================
- Immutability-first: contracts and models are frozen
- Deterministic: identical inputs produce identical layouts
- Explicit errors: failures are values, nothing escapes the core
- Full rebuild: a new alert id always rebuilds the model from scratch

Presentation, selection and the HTTP view API live in `alertview`.
"""

__version__ = "0.1.0"
