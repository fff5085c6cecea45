# Supabase table: notes
# This file documents the expected database schema
# Actual operations are handled via Supabase SDK in service.py

"""
Expected Supabase table structure:
- id: uuid (primary key)
- user_id: uuid (foreign key to auth.users.id, not null) - owner
- title: text (not null)
- content: text (not null) - markdown source
- created_at: timestamp (default: now())
- updated_at: timestamp (default: now())
- RLS: owner can select/insert/update/delete own rows
"""
