# -*- coding: utf-8 -*-
"""
LocForge Controllers Package

This package contains the Controller layer of MVC/MVP architecture.
Controllers handle business logic and coordinate between Models and Views.
"""

from controllers.app_controller import AppController
from controllers.compare_controller import CompareController
from controllers.editor_controller import EditorController
from controllers.locale_controller import LocaleController
from controllers.vehicle_order_controller import VehicleOrderController

__all__ = [
    'AppController',
    'CompareController',
    'EditorController',
    'LocaleController',
    'VehicleOrderController',
]
