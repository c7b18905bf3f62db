"""
Candidate recipe store and product lookup.

Responsibilities:
- Load the processed recipe and product files into memory (pandas).
- Answer "any of these ingredient tokens" queries with exact token containment.
- Resolve an already-decoded barcode to a product's ingredient list.
- Surface load failures as ``StoreUnavailableError``.
"""
