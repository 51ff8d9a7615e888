"""User context package for medroute.

Provides:
- fact_extractor: deterministic extraction of user facts from chat messages
- store: monotonic merge of extracted facts into a UserContext
"""
