# Supabase table: photos
# Supabase Storage bucket: photos
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - owner
- name: text (not null) - display name, defaults to the uploaded file name
- url: text (not null) - public URL of the stored object
- storage_path: text (not null) - object key inside the bucket, "{user_id}/{uuid}.{ext}"
- created_at: timestamp (default: now())
- RLS: owner can select/insert/update/delete own rows; bucket objects under "{user_id}/" only
"""
