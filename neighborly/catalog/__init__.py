"""
Neighborhood catalog package.

Responsibilities:
- Load the neighborhood dataset from JSON into typed records.
- Hold an immutable snapshot that ranking passes read from.
- Validate records against the catalog's range and identity rules.
- Report completeness and accuracy metrics for the loaded data.
"""
