"""Home Assistant custom integrations namespace."""

from pkgutil import extend_path

__path__ = extend_path(__path__, __name__)
