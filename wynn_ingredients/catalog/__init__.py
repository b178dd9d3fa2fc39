"""
Read side of the ingredient catalog.

Responsibilities:
- Load the persisted catalog JSON into memory.
- Filter and page ingredients for the API.
- Summarize the catalog (tiers, skills, places) for frontend filters.
"""
