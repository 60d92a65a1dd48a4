from .mirror import MqttEventMirror

__all__ = ["MqttEventMirror"]
