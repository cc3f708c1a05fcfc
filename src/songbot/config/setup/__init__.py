"""📦 Збірка застосунку: DI-контейнер і реєстрація хендлерів."""
