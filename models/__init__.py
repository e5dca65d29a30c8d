"""Input records, enums and derived result types for the analytics engine."""
