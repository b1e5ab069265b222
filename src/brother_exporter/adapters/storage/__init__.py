from brother_exporter.adapters.storage.ring_buffer import RingBufferLogStorage

__all__ = ["RingBufferLogStorage"]
