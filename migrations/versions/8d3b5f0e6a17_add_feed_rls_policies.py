"""add_feed_rls_policies

Revision ID: 8d3b5f0e6a17
Revises: 4c1e7a9d2b60
Create Date: 2026-09-14 17:20:48.553930

"""

from collections.abc import Sequence

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "8d3b5f0e6a17"
down_revision: str | Sequence[str] | None = "4c1e7a9d2b60"
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None

POST_BUCKETS = ("avatars", "post-images")


def upgrade() -> None:
    """Add Row Level Security policies for profiles, posts and storage buckets.

    The API connects with a service account that bypasses RLS and checks
    ownership itself. These policies govern direct Supabase client access.
    """
    for table in ["profiles", "posts"]:
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY;")

    # --- Profiles ---
    # SELECT: any signed-in user can read any profile
    op.execute("""
        CREATE POLICY profile_select ON profiles
            FOR SELECT TO authenticated USING (true);
    """)
    # INSERT/UPDATE: only your own row
    op.execute("""
        CREATE POLICY profile_insert ON profiles
            FOR INSERT TO authenticated
            WITH CHECK (id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY profile_update ON profiles
            FOR UPDATE TO authenticated
            USING (id = (SELECT auth.uid()))
            WITH CHECK (id = (SELECT auth.uid()));
    """)

    # --- Posts ---
    op.execute("""
        CREATE POLICY post_select ON posts
            FOR SELECT TO authenticated USING (true);
    """)
    op.execute("""
        CREATE POLICY post_insert ON posts
            FOR INSERT TO authenticated
            WITH CHECK (user_id = (SELECT auth.uid()));
    """)
    op.execute("""
        CREATE POLICY post_delete ON posts
            FOR DELETE TO authenticated
            USING (user_id = (SELECT auth.uid()));
    """)

    # --- Storage buckets (public read) ---
    for bucket in POST_BUCKETS:
        op.execute(f"""
            INSERT INTO storage.buckets (id, name, public)
            VALUES ('{bucket}', '{bucket}', true)
            ON CONFLICT (id) DO NOTHING;
        """)


def downgrade() -> None:
    """Remove feed RLS policies."""
    for policy, table in [
        ("post_delete", "posts"),
        ("post_insert", "posts"),
        ("post_select", "posts"),
        ("profile_update", "profiles"),
        ("profile_insert", "profiles"),
        ("profile_select", "profiles"),
    ]:
        op.execute(f"DROP POLICY IF EXISTS {policy} ON {table};")

    for table in ["posts", "profiles"]:
        op.execute(f"ALTER TABLE {table} DISABLE ROW LEVEL SECURITY;")
