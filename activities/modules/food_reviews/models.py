# Supabase tables: food_photos, food_reviews
# Supabase Storage bucket: food-photos
# This file documents the expected database schema

"""
Expected Supabase table structure:

food_photos:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - uploader
- name: text (not null)
- url: text (not null) - public URL
- storage_path: text (not null) - "{user_id}/{uuid}.{ext}"
- owner_email: text (nullable) - uploader's email at upload time
- created_at: timestamp (default: now())
- RLS: everyone signed in can select; owner can insert/update/delete

food_reviews:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - reviewer
- food_photo_id: uuid (foreign key to food_photos.id, not null)
- review: text (not null)
- rating: integer (not null, check 1..5)
- reviewer_email: text (nullable)
- created_at: timestamp (default: now())
- unique constraint on (food_photo_id, user_id)
- RLS: everyone signed in can select; reviewer can insert/update/delete own row
"""
