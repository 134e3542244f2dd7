"""Build metadata stamped by the release pipeline."""

APP_VERSION = "1.0.0"
