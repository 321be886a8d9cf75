from watchconsole.gateway.backend import BackendGateway, BanStatus, HttpBackendGateway

__all__ = [
    "BackendGateway",
    "BanStatus",
    "HttpBackendGateway",
]
