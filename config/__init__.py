"""
Configuration module for the scheduling assistant.
Centralizes settings, prompts and fixed messages.
"""

from config.settings import *
from config.prompts import *
