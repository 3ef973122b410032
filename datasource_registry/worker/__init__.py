"""Programs executed inside the discovery interpreter."""
