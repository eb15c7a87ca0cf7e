from engine.events.event import Event, format_timestamp, info_message, is_pong, ping_message

__all__ = ["Event", "format_timestamp", "info_message", "is_pong", "ping_message"]
