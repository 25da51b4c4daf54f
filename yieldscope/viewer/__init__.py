"""Terminal/chart presentation of fetched yield curves."""
