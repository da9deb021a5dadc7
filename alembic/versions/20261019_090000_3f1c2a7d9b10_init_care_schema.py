"""init care schema

Revision ID: 3f1c2a7d9b10
Revises:
Create Date: 2026-10-19 09:00:00.000000

"""

from typing import Sequence, Union

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "3f1c2a7d9b10"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.execute(
        """
        CREATE TABLE profiles (
            id UUID PRIMARY KEY,
            email VARCHAR(255),
            full_name VARCHAR(255),
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE
        );
    """
    )
    op.execute(
        """
        CREATE TABLE children (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            parent_id UUID NOT NULL,
            first_name VARCHAR(100) NOT NULL,
            date_of_birth DATE NOT NULL,
            diagnosis VARCHAR(255),
            diagnosis_date DATE,
            notes TEXT,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE
        );
    """
    )
    op.execute("CREATE INDEX idx_children_parent_id ON children(parent_id);")

    op.execute(
        """
        CREATE TABLE behavior_logs (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            child_id UUID NOT NULL REFERENCES children(id) ON DELETE CASCADE,
            parent_id UUID NOT NULL,
            log_date DATE NOT NULL,
            mood VARCHAR(20) CHECK (mood IN (
                'happy', 'calm', 'neutral', 'frustrated', 'anxious', 'overwhelmed'
            )),
            energy_level INTEGER NOT NULL DEFAULT 3
                CHECK (energy_level BETWEEN 1 AND 5),
            sleep_quality INTEGER NOT NULL DEFAULT 3
                CHECK (sleep_quality BETWEEN 1 AND 5),
            sleep_hours DOUBLE PRECISION,
            behaviors_observed JSON NOT NULL DEFAULT '[]',
            triggers TEXT,
            successes TEXT,
            challenges TEXT,
            notes TEXT,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_behavior_logs_child_date "
        "ON behavior_logs(child_id, log_date DESC);"
    )
    op.execute("CREATE INDEX idx_behavior_logs_parent_id ON behavior_logs(parent_id);")

    op.execute(
        """
        CREATE TABLE activities (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            child_id UUID NOT NULL REFERENCES children(id) ON DELETE CASCADE,
            parent_id UUID NOT NULL,
            activity_date DATE NOT NULL,
            activity_type VARCHAR(20) NOT NULL CHECK (activity_type IN (
                'therapy', 'exercise', 'learning', 'routine', 'sensory'
            )),
            activity_name VARCHAR(255) NOT NULL,
            duration_minutes INTEGER,
            difficulty_level INTEGER NOT NULL DEFAULT 3
                CHECK (difficulty_level BETWEEN 1 AND 5),
            child_engagement INTEGER NOT NULL DEFAULT 3
                CHECK (child_engagement BETWEEN 1 AND 5),
            completion_status VARCHAR(20) NOT NULL CHECK (completion_status IN (
                'completed', 'partial', 'skipped'
            )),
            notes TEXT,
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_activities_child_date "
        "ON activities(child_id, activity_date DESC);"
    )
    op.execute("CREATE INDEX idx_activities_parent_id ON activities(parent_id);")

    op.execute(
        """
        CREATE TABLE ai_recommendations (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            child_id UUID NOT NULL REFERENCES children(id) ON DELETE CASCADE,
            parent_id UUID NOT NULL,
            recommendation_date DATE NOT NULL,
            recommendation_type VARCHAR(20) NOT NULL CHECK (recommendation_type IN (
                'daily_plan', 'exercise', 'strategy', 'intervention'
            )),
            title VARCHAR(255) NOT NULL,
            description TEXT NOT NULL,
            rationale TEXT NOT NULL,
            priority VARCHAR(10) NOT NULL CHECK (priority IN ('high', 'medium', 'low')),
            status VARCHAR(20) NOT NULL DEFAULT 'pending'
                CHECK (status IN ('pending', 'completed', 'skipped')),
            created_at TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP,
            updated_at TIMESTAMP WITH TIME ZONE
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_ai_recommendations_child_id ON ai_recommendations(child_id);"
    )
    op.execute(
        "CREATE INDEX idx_ai_recommendations_parent_status "
        "ON ai_recommendations(parent_id, status);"
    )

    op.execute(
        """
        CREATE TABLE audit_logs (
            id UUID PRIMARY KEY DEFAULT gen_random_uuid(),
            user_id UUID NOT NULL,
            action VARCHAR(10) NOT NULL
                CHECK (action IN ('view', 'create', 'update', 'delete')),
            table_name VARCHAR(50) NOT NULL,
            record_id VARCHAR(64),
            ip_address VARCHAR(255) NOT NULL DEFAULT 'unknown',
            user_agent VARCHAR(512) NOT NULL DEFAULT 'unknown',
            timestamp TIMESTAMP WITH TIME ZONE NOT NULL DEFAULT CURRENT_TIMESTAMP
        );
    """
    )
    op.execute(
        "CREATE INDEX idx_audit_logs_user_timestamp "
        "ON audit_logs(user_id, timestamp DESC);"
    )


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS audit_logs;")
    op.execute("DROP TABLE IF EXISTS ai_recommendations;")
    op.execute("DROP TABLE IF EXISTS activities;")
    op.execute("DROP TABLE IF EXISTS behavior_logs;")
    op.execute("DROP TABLE IF EXISTS children;")
    op.execute("DROP TABLE IF EXISTS profiles;")
