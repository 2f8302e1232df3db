"""render-proxy: render dynamic pages to static HTML or JPEG snapshots."""

__version__ = "0.1.0"
