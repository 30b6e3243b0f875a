class Translator:
    def __init__(self) -> None:
        self.language = "en"
        self.translations = {
            "en": {},
            "es": {
                "Log": "Registrar",
                "History": "Historial",
                "Analytics": "Análisis",
                "New Workout Session": "Nueva Sesión",
                "Workout History": "Historial de Entrenamientos",
                "Progress Dashboard": "Panel de Progreso",
                "Date": "Fecha",
                "Workout Name": "Nombre del Entrenamiento",
                "Save Workout": "Guardar Entrenamiento",
                "+ Add Exercise": "+ Añadir Ejercicio",
                "+ Add Set": "+ Añadir Serie",
                "Remove": "Quitar",
                "Delete": "Eliminar",
                "No workouts logged yet.": "Aún no hay entrenamientos.",
                "Log workouts to see analytics.": "Registra entrenamientos para ver el análisis.",
                "Total Volume Over Time": "Volumen Total en el Tiempo",
                "Top Exercises by Volume": "Ejercicios Principales por Volumen",
            },
        }

    def set_language(self, lang: str) -> None:
        self.language = lang

    def gettext(self, key: str) -> str:
        return self.translations.get(self.language, {}).get(key, key)

translator = Translator()
