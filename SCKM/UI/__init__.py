from .app import SCKMApp, run_app

__all__ = ['SCKMApp', 'run_app']
