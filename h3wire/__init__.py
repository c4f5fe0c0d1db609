"""HTTP/3 wire-format primitives: varints, stream and push ids, datagrams, settings and frames."""

__version__ = "0.1.0"

__all__ = ["coding", "varint", "push", "stream", "ext", "settings", "frame"]