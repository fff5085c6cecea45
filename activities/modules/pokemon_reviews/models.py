# Supabase table: pokemon_reviews
# This file documents the expected database schema

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - reviewer
- pokemon_id: integer (not null) - PokeAPI id
- pokemon_name: text (not null) - PokeAPI name, used for name sorting
- review: text (not null)
- rating: integer (not null, check 1..5)
- reviewer_email: text (nullable)
- created_at: timestamp (default: now())
- unique constraint on (pokemon_id, user_id)
- RLS: everyone signed in can select; reviewer can insert/update/delete own row

Pokemon themselves are not stored; they are looked up on PokeAPI by name or id.
"""
