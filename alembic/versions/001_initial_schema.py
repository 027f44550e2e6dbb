"""Initial schema: users, projects and files with RLS policies.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""

from alembic import op

# revision identifiers, used by Alembic.
revision = "001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade():
    # Empty or unset app.user_id maps to NULL, which system_conn uses to bypass the policies
    op.execute("""
        CREATE OR REPLACE FUNCTION get_app_user_id() RETURNS uuid AS $$
        DECLARE
            val text;
        BEGIN
            val := current_setting('app.user_id', true);
            IF val IS NULL OR val = '' THEN
                RETURN NULL;
            END IF;
            RETURN val::uuid;
        END;
        $$ LANGUAGE plpgsql STABLE;
    """)

    op.execute("""
        CREATE TABLE users (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            username TEXT UNIQUE NOT NULL,
            password_hash TEXT NOT NULL,
            github_token TEXT,
            created_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)

    op.execute("""
        CREATE TABLE projects (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL REFERENCES users(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            description TEXT,
            template TEXT NOT NULL DEFAULT 'static',
            created_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now()
        );
    """)
    op.execute("CREATE INDEX idx_projects_user ON projects(user_id, updated_at DESC);")

    op.execute("""
        CREATE TABLE files (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            project_id UUID NOT NULL REFERENCES projects(id) ON DELETE CASCADE,
            name TEXT NOT NULL,
            path TEXT NOT NULL,
            content TEXT NOT NULL DEFAULT '',
            is_folder BOOLEAN NOT NULL DEFAULT false,
            parent_path TEXT,
            updated_at TIMESTAMPTZ NOT NULL DEFAULT now(),
            UNIQUE(project_id, path)
        );
    """)

    for table in ("users", "projects", "files"):
        op.execute(f"ALTER TABLE {table} ENABLE ROW LEVEL SECURITY")
        op.execute(f"ALTER TABLE {table} FORCE ROW LEVEL SECURITY")

    op.execute("""
        CREATE POLICY users_all_own ON users
        FOR ALL
        USING (get_app_user_id() IS NULL OR id = get_app_user_id())
        WITH CHECK (get_app_user_id() IS NULL OR id = get_app_user_id());
    """)

    op.execute("""
        CREATE POLICY projects_all_own ON projects
        FOR ALL
        USING (get_app_user_id() IS NULL OR user_id = get_app_user_id())
        WITH CHECK (get_app_user_id() IS NULL OR user_id = get_app_user_id());
    """)

    op.execute("""
        CREATE POLICY files_all_own ON files
        FOR ALL
        USING (
            get_app_user_id() IS NULL
            OR project_id IN (SELECT id FROM projects WHERE user_id = get_app_user_id())
        )
        WITH CHECK (
            get_app_user_id() IS NULL
            OR project_id IN (SELECT id FROM projects WHERE user_id = get_app_user_id())
        );
    """)


def downgrade():
    op.execute("DROP TABLE IF EXISTS files")
    op.execute("DROP TABLE IF EXISTS projects")
    op.execute("DROP TABLE IF EXISTS users")
    op.execute("DROP FUNCTION IF EXISTS get_app_user_id()")
