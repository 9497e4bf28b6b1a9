"""
CLI support modules: runtime configuration and machine-aware output.
"""

from selectorkit.cli import config, output

__all__ = ['config', 'output']
