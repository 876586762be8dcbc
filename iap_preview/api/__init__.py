"""HTTP routers for the preview server."""
