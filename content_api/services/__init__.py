"""
Business logic services.

Each module receives the Supabase client from the route layer and returns
plain dicts; routes turn them into response models.
"""
