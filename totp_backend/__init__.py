"""
TOTP backend package: Flask verification server, remote verification client
and the `totp-lab` command line tool, all built on totp_core.
"""

from .app import create_app

__all__ = ['create_app']
