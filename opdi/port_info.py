from .property_parser import parse_properties


class DeviceInfo:
    """Device info string sent by a device on connect."""

    def __init__(self, info: str) -> None:
        self.info = info
        self.properties = parse_properties(info)

    @property
    def start_group(self) -> str | None:
        return self.properties.get("startGroup")


class PortInfo:
    def __init__(self, port_id: str, extended_info: str = "") -> None:
        self.port_id = port_id
        self.extended_info = ""
        self.properties: dict[str, str] = {}
        self.set_extended_info(extended_info)

    def set_extended_info(self, info: str) -> None:
        self.extended_info = info
        self.properties = parse_properties(info)

    def get_property(self, name: str, default: str | None = None) -> str | None:
        return self.properties.get(name, default)

    @property
    def unit(self) -> str | None:
        return self.properties.get("unit")

    @property
    def group(self) -> str | None:
        return self.properties.get("group")
