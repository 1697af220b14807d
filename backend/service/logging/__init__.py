"""
Session Logging Module

Provides per-session logging capabilities for workflow editing sessions.
"""
from service.logging.session_logger import SessionLogger, get_session_logger, release_session_logger

__all__ = ['SessionLogger', 'get_session_logger', 'release_session_logger']
