"""
SmartVault Password Manager
Copyright (c) 2025

DEMO NOTICE AND THREAT MODEL:
This tool is a demonstration vault. Records are held in memory only and the
PIN gate is a fixed shared secret, not real authentication. Do not store real
credentials in it. Passwords sent for AI analysis leave the device and are
processed by the configured Gemini endpoint.
"""

__version__ = "1.0"
