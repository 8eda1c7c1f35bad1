"""create devotional core tables

Revision ID: 20261017_120000
Revises:
Create Date: 2026-10-17 12:00:00.000000

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = '20261017_120000'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _uuid_pk(name: str = 'id') -> sa.Column:
    return sa.Column(
        name, postgresql.UUID(as_uuid=True),
        server_default=sa.text('gen_random_uuid()'), nullable=False,
    )


def upgrade() -> None:
    """
    Таблицы ядра достижений и ежедневных заданий:
    1. profiles — счётчики активности (серия, «поделиться», записи дневника)
    2. studies / chapters / user_progress — исследования и прохождение глав
    3. achievements / user_achievements — каталог и полученные достижения
       (PK (user_id, achievement_id) не даёт выдать достижение дважды)
    4. daily_tasks_progress — выполнение ежедневных заданий по датам
    5. app_settings / user_logs / admin_logs — флаг журнала и журналы
    """
    # 1. Профили
    op.create_table(
        'profiles',
        sa.Column('id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID пользователя'),
        sa.Column('first_name', sa.String(), nullable=True, comment='Имя'),
        sa.Column('last_name', sa.String(), nullable=True, comment='Фамилия'),
        sa.Column('streak_count', sa.Integer(), server_default=sa.text('0'), nullable=False, comment='Серия дней подряд'),
        sa.Column('total_shares', sa.Integer(), server_default=sa.text('0'), nullable=False, comment='Сколько раз делился контентом'),
        sa.Column('total_journal_entries', sa.Integer(), server_default=sa.text('0'), nullable=False, comment='Записей в духовном дневнике'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Дата создания профиля'),
        sa.PrimaryKeyConstraint('id', name='profiles_pkey'),
        comment='Профили пользователей',
    )

    # 2. Исследования, главы, прогресс
    op.create_table(
        'studies',
        _uuid_pk(),
        sa.Column('title', sa.String(), nullable=False, comment='Название'),
        sa.Column('description', sa.Text(), nullable=True, comment='Описание'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Дата создания'),
        sa.PrimaryKeyConstraint('id', name='studies_pkey'),
        comment='Исследования',
    )
    op.create_table(
        'chapters',
        _uuid_pk(),
        sa.Column('study_id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID исследования'),
        sa.Column('title', sa.String(), nullable=False, comment='Заголовок главы'),
        sa.Column('content', sa.Text(), nullable=True, comment='Текст главы'),
        sa.Column('order_number', sa.Integer(), server_default=sa.text('0'), nullable=False, comment='Порядок внутри исследования'),
        sa.ForeignKeyConstraint(['study_id'], ['studies.id'], ondelete='CASCADE', name='chapters_study_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='chapters_pkey'),
        comment='Главы исследований',
    )
    op.create_index('idx_chapters_study_id', 'chapters', ['study_id'], unique=False)

    op.create_table(
        'user_progress',
        _uuid_pk(),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID пользователя'),
        sa.Column('chapter_id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID главы'),
        sa.Column('study_id', postgresql.UUID(as_uuid=True), nullable=True, comment='ID исследования'),
        sa.Column('completed_at', sa.DateTime(timezone=True), nullable=True, comment='Когда глава пройдена'),
        sa.ForeignKeyConstraint(['chapter_id'], ['chapters.id'], ondelete='CASCADE', name='user_progress_chapter_id_fkey'),
        sa.ForeignKeyConstraint(['study_id'], ['studies.id'], ondelete='CASCADE', name='user_progress_study_id_fkey'),
        sa.PrimaryKeyConstraint('id', name='user_progress_pkey'),
        sa.UniqueConstraint('user_id', 'chapter_id', name='user_progress_user_chapter_key'),
        comment='Прогресс пользователей по главам',
    )
    op.create_index('idx_user_progress_user_id', 'user_progress', ['user_id'], unique=False)

    # 3. Достижения
    op.create_table(
        'achievements',
        _uuid_pk(),
        sa.Column('name', sa.String(), nullable=False, comment='Название достижения (ключ сопоставления)'),
        sa.Column('description', sa.Text(), nullable=True, comment='Описание достижения'),
        sa.Column('icon_name', sa.String(length=64), nullable=True, comment='Имя иконки'),
        sa.PrimaryKeyConstraint('id', name='achievements_pkey'),
        sa.UniqueConstraint('name', name='achievements_name_key'),
        comment='Достижения',
    )
    op.create_table(
        'user_achievements',
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID пользователя'),
        sa.Column('achievement_id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID достижения'),
        sa.Column('unlocked_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Когда получено'),
        sa.ForeignKeyConstraint(['achievement_id'], ['achievements.id'], ondelete='CASCADE', name='user_achievements_achievement_id_fkey'),
        sa.PrimaryKeyConstraint('user_id', 'achievement_id', name='user_achievements_pkey'),
        comment='Связь пользователей с достижениями',
    )
    op.create_index('idx_user_achievements', 'user_achievements', ['user_id', 'unlocked_at'], unique=False)

    # 4. Ежедневные задания
    op.create_table(
        'daily_tasks_progress',
        _uuid_pk(),
        sa.Column('user_id', postgresql.UUID(as_uuid=True), nullable=False, comment='ID пользователя'),
        sa.Column('task_name', sa.String(length=64), nullable=False, comment='Имя задания'),
        sa.Column('task_date', sa.Date(), nullable=False, comment='Локальная дата выполнения'),
        sa.Column('value', sa.Text(), nullable=True, comment='Ответ пользователя'),
        sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Когда сохранено'),
        sa.PrimaryKeyConstraint('id', name='daily_tasks_progress_pkey'),
        sa.UniqueConstraint('user_id', 'task_name', 'task_date', name='daily_tasks_progress_user_task_date_key'),
        comment='Ежедневные задания пользователей',
    )
    op.create_index('idx_daily_tasks_progress_user_date', 'daily_tasks_progress', ['user_id', 'task_date'], unique=False)

    # 5. Настройки и журналы
    op.create_table(
        'app_settings',
        sa.Column('key', sa.String(length=128), nullable=False, comment='Ключ настройки'),
        sa.Column('value', sa.String(), nullable=True, comment='Значение'),
        sa.PrimaryKeyConstraint('key', name='app_settings_pkey'),
        comment='Настройки приложения',
    )
    op.execute("INSERT INTO app_settings (key, value) VALUES ('user_logging_enabled', 'true')")

    for table, user_column, comment in (
        ('user_logs', 'user_id', 'Журнал действий пользователей'),
        ('admin_logs', 'admin_user_id', 'Журнал действий администраторов'),
    ):
        op.create_table(
            table,
            _uuid_pk(),
            sa.Column(user_column, postgresql.UUID(as_uuid=True), nullable=False),
            sa.Column('event_type', sa.String(length=64), nullable=False, comment='Тип события'),
            sa.Column('description', sa.Text(), nullable=True, comment='Описание'),
            sa.Column('created_at', sa.DateTime(timezone=True), server_default=sa.text('now()'), nullable=False, comment='Когда'),
            sa.PrimaryKeyConstraint('id', name=f'{table}_pkey'),
            comment=comment,
        )
    op.create_index('idx_user_logs_user_created', 'user_logs', ['user_id', 'created_at'], unique=False)
    op.create_index('idx_admin_logs_admin_created', 'admin_logs', ['admin_user_id', 'created_at'], unique=False)


def downgrade() -> None:
    op.drop_index('idx_admin_logs_admin_created', table_name='admin_logs')
    op.drop_index('idx_user_logs_user_created', table_name='user_logs')
    op.drop_table('admin_logs')
    op.drop_table('user_logs')
    op.drop_table('app_settings')
    op.drop_index('idx_daily_tasks_progress_user_date', table_name='daily_tasks_progress')
    op.drop_table('daily_tasks_progress')
    op.drop_index('idx_user_achievements', table_name='user_achievements')
    op.drop_table('user_achievements')
    op.drop_table('achievements')
    op.drop_index('idx_user_progress_user_id', table_name='user_progress')
    op.drop_table('user_progress')
    op.drop_index('idx_chapters_study_id', table_name='chapters')
    op.drop_table('chapters')
    op.drop_table('studies')
    op.drop_table('profiles')
