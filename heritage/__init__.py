"""Heritage enricher — harvest descriptive text for heritage-site records."""
