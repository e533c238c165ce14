from signgrid.visualizer.app import DashApp

__all__ = ["DashApp"]
