"""
Integration modules for remote task providers
"""

from .google_tasks import GoogleTasksClient, connect

__all__ = ['GoogleTasksClient', 'connect']
