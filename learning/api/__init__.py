"""Learning API routers."""
