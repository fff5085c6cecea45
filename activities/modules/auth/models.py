# Supabase Auth
# Accounts live in Supabase's auth.users table; no custom tables are required.

"""
Supabase Auth calls used by this module:
- auth.sign_up() - Register new users
- auth.sign_in_with_password() - Authenticate users
- auth.get_user() - Resolve the user behind an access token
- auth.refresh_session() - Exchange a refresh token for a new session
- auth.admin.sign_out() - Revoke a session
- auth.admin.delete_user() - Remove an account (service role key)

The user's email is copied onto rows that display it to other users
(food_photos.owner_email, *_reviews.reviewer_email).
"""
