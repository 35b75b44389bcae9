# Services package init
"""
Village Backend — Services Layer
==================================

What:  Business logic between the routes (HTTP) and the database.
How:   Stateless singletons; every method receives the request's AsyncSession,
       and creators also receive the SequenceGenerator that hands out ids.

Service Inventory:
    - SequenceGenerator: atomic named counters ("users", "crop", ...)
    - UserService: signup, login, activation, admin and profile management
    - AnnouncementService: notices published by administrators
    - FeedbackService: citizen suggestions and queries with their responses
    - CropService: places, crops, prices and the crops-for-place join
    - store_errors: maps driver failures to DuplicateKeyError / DatabaseError
"""
