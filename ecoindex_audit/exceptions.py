"""Exceptions raised by ecoindex-audit"""


class EcoIndexAuditError(Exception):
    """Base class for all audit errors"""


class ConfigurationError(EcoIndexAuditError):
    """Required configuration is missing or invalid"""


class LighthouseError(EcoIndexAuditError):
    """Lighthouse could not produce a usable report"""
