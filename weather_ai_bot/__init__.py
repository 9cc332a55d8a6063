"""
Telegram Weather AI Bot
=======================
A chat bot that asks a language model for structured weather data
and replies with formatted forecasts and inline drill-down buttons.
"""

__version__ = "1.0.0"
__author__ = "Weather AI Bot"
