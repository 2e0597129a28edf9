"""
Configuration module for Vargo.
Provides configuration loading and validation for scans and the vendor database.
"""

from .config_loader import ConfigLoader, ScanConfig, VendorConfig

__all__ = ['ConfigLoader', 'ScanConfig', 'VendorConfig']
