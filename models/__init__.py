# -*- coding: utf-8 -*-
"""
LocForge Models Package

Data models used throughout the application (Model layer of MVC).
"""

from models.locale_file import LocaleFile, LocaleFileFormat
from models.session_model import SessionModel
from models.settings_model import SettingsModel

__all__ = ['LocaleFile', 'LocaleFileFormat', 'SessionModel', 'SettingsModel']
