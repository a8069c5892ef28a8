"""
dcdc-tools Exceptions

Custom exception classes for converter design and assembly with helpful
error messages.
"""


class DesignValidationError(ValueError):
    """Raised when a design parameter violates its positivity constraint."""

    def __init__(self, field: str, value: object, requirement: str = "must be positive"):
        self.field = field
        self.value = value
        self.requirement = requirement

        super().__init__(f"Invalid {field}: {value!r} {requirement}")


class ConfigurationMismatchError(ValueError):
    """Raised when an architecture element needs a port the interface lacks."""

    def __init__(self, element: str, port: str, available_ports: list[str]):
        self.element = element
        self.port = port
        self.available_ports = available_ports

        msg_parts = [f"{element} element requires a '{port}' port on the controller interface"]
        msg_parts.append(f"\n\nAvailable ports: {', '.join(available_ports) or '(none)'}")
        msg_parts.append("\n\nTo fix:")
        msg_parts.append(f"\n  1. Declare the interface with a '{port}' port")
        msg_parts.append(f"\n  2. Or build the architecture without a {element} element")

        super().__init__("".join(msg_parts))


class InterfaceShapeError(TypeError):
    """Raised when an object does not have the shape of a controller bundle."""

    def __init__(self, kind: str, missing_ports: list[str], received: object):
        self.kind = kind
        self.missing_ports = missing_ports
        self.received_type = type(received).__name__

        msg_parts = [f"Expected a '{kind}' interface, got {self.received_type}"]
        if missing_ports:
            msg_parts.append(f"\n\nMissing ports: {', '.join(missing_ports)}")

        super().__init__("".join(msg_parts))
