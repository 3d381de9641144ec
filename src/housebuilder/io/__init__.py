"""JSON loading of configs and host fixtures, and build reports."""

from .parser import load_config, load_host, result_to_dict, save_report

__all__ = ["load_config", "load_host", "result_to_dict", "save_report"]
