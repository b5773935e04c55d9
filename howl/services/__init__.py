# Services package init
"""
Howl Backend — Services Layer
===============================

What:  Record rules and storage calls, sitting between routes (HTTP) and the database.
How:   Services receive the request's AsyncSession, validate input, run
       queries, and raise application exceptions. Routes only translate
       results into status codes.

Service Inventory:
    - RecordService (base): schema-driven create / get / replace / delete
    - BusinessChildService (base): records keyed to a business by `businessid`
    - BusinessService: paginated listing and the business detail aggregate
    - ReviewService, PhotoService: business children
"""
