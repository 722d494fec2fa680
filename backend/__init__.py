"""Task board backend: FastAPI service over Supabase auth and Postgres."""
