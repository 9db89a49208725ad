"""
Processing layers of the funnel reconciler.

- data_ingestion: ledger parsing, line classification, metric extraction,
  identity resolution
- intelligence: LLM-backed narrative diagnosis of a parsed report
"""
