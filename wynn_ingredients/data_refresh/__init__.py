"""
Ingredient catalog refresh pipeline.

Responsibilities:
- Fetch the raw item database and the world place labels.
- Keep only the items that qualify as crafting ingredients.
- Attach the nearest known place to items with a drop coordinate.
- Normalize every ingredient into the canonical catalog schema.
- Persist the catalog as a single JSON document for the API and frontend.
"""
