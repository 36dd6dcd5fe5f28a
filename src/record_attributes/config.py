"""Library settings, read from RECORD_ATTRIBUTES_* environment variables."""

import os

from pydantic import BaseModel


class Settings(BaseModel):
    # Token replaced by the owning table name inside expression attributes
    table_placeholder: str = os.getenv("RECORD_ATTRIBUTES_TABLE_PLACEHOLDER", "[table]")
    # SQL function used to make string expression ordering case-insensitive
    case_fold_function: str = os.getenv("RECORD_ATTRIBUTES_CASE_FOLD_FUNCTION", "LOWER")
    language: str = os.getenv("RECORD_ATTRIBUTES_LANGUAGE", "en")
    fieldset_css_class: str = os.getenv("RECORD_ATTRIBUTES_FIELDSET_CLASS", "fieldset")
    summary_css_class: str = os.getenv("RECORD_ATTRIBUTES_SUMMARY_CLASS", "dgridsummary")
    date_search_size: int = int(os.getenv("RECORD_ATTRIBUTES_DATE_SEARCH_SIZE", "10"))
    search_size: int = int(os.getenv("RECORD_ATTRIBUTES_SEARCH_SIZE", "20"))


settings = Settings()
