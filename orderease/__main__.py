"""Run the OrderEase app with ``python -m orderease``."""

from __future__ import annotations

from orderease.orderease_app import main

main()
