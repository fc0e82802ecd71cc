"""Pipeline stages for company name deduplication."""
