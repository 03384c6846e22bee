"""REST API for the conveyor calculator."""
