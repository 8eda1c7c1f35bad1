# run.py (корень проекта)

import os
from dotenv import load_dotenv

# Явно читаем .env
load_dotenv(dotenv_path=os.path.join(os.getcwd(), ".env"), encoding="utf-8-sig")

if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "app.api.main:app",    # строка "модуль:приложение", нужна для reload
        host=os.environ.get("HOST", "0.0.0.0"),
        port=int(os.environ.get("PORT", "8000")),
        log_config=None,       # не переопределяем наш logger
        reload=os.environ.get("RELOAD", "false").lower() == "true",
    )
