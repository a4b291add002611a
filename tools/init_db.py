from recipe_ai_core.db.database import DATABASE_URL, init_db


def main():
    init_db()
    print(f"✅ DB creada/verificada usando DATABASE_URL ({DATABASE_URL}).")


if __name__ == "__main__":
    main()
