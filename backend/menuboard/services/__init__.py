# Services package init
"""
MenuBoard — Services Layer
============================

Service Inventory:
    - RestaurantService: explicit queries for restaurants, menus and items
    - validation: pure restaurant field rules and sanitization

Routes call services; services never see HTTP objects.
"""
