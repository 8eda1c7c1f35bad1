# Заполнение таблицы achievements каталогом из кода. Запуск из корня проекта:
#   python scripts/seed_achievements.py
# Существующие строки (по name) не меняются. Если определение есть в коде, а строки нет,
# оценка пропускает его с предупреждением в логе — этот скрипт убирает такой разрыв.

import asyncio
import sys
from pathlib import Path

project_root = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(project_root))

from dotenv import load_dotenv
load_dotenv(dotenv_path=project_root / ".env", encoding="utf-8-sig")


async def main():
    from app.services.achievements_service import AchievementsService
    from app.services.achievement_catalog import ACHIEVEMENT_DEFINITIONS

    inserted = await AchievementsService().sync_catalog()
    print(f"OK: achievements seeded, inserted {len(inserted)} of {len(ACHIEVEMENT_DEFINITIONS)}.")
    for name in inserted:
        print("  +", name)
    return 0


if __name__ == "__main__":
    try:
        sys.exit(asyncio.run(main()))
    except Exception as e:
        print("FAIL:", e, file=sys.stderr)
        sys.exit(1)
