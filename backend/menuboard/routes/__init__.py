# Routes package init
"""
MenuBoard — Routes Package
============================

Route Inventory:
    - restaurants.py:  GET    /restaurants              (list page)
                       GET    /restaurants/{id}         (detail page)
                       POST   /restaurants              (create, validated)
                       PUT    /restaurants/{id}         (replace, validated)
                       PATCH  /restaurants/{id}         (partial update)
                       POST   /delete/{id}              (delete, redirect)
                       GET    /menus                    (menus page)
    - forms.py:        GET    /new-restaurant-form      (form page)
                       POST   /new-restaurant           (form submit)
    - health.py:       GET    /health                   (service health check)

Routes stay thin: read the body, call RestaurantService, render or respond.
"""
