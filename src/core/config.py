from pydantic_settings import BaseSettings, SettingsConfigDict
import os

# Load .env file if it exists, for local development
# In production, environment variables should be set directly.
if os.path.exists(".env"):
    from dotenv import load_dotenv
    load_dotenv()

class AssessmentSettings(BaseSettings):
    definition_path: str = "assets/quiz_data.yml"
    expected_sections: int = 4
    questions_per_section: int = 10
    report_title: str = "RAG Assessment Results"

    log_level: str = "INFO"
    json_logs: bool = True

    model_config = SettingsConfigDict(env_prefix='RAG_ASSESSMENT_')

# Instantiate settings
settings = AssessmentSettings()
