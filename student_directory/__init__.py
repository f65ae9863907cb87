"""Student directory service: records, prefix search and a local session cache."""
