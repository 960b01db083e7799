from wopihost.domains.discovery.services import Discovery, XmlDiscovery

__all__ = ["Discovery", "XmlDiscovery"]
