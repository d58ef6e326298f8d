"""Report extraction, aggregation and rendering."""
