import os
from dataclasses import dataclass
from typing import Optional

from superstore_pipeline.errors import ConfigurationError
from superstore_pipeline.transformer import DateErrorPolicy

'''
    Configuration classes for the Superstore sales pipeline.

    PipelineConfig holds the input location, output locations and transformer
    policy. SnowflakeConfig holds the connection details for the table sink.
    Both can be loaded from environment variables so that account names and
    credentials stay out of the code.
'''

OUTPUT_FORMATS = ("csv", "parquet")


def _env_flag(environ, name):
    return environ.get(name, "").strip().lower() in ("1", "true", "yes")


@dataclass
class SnowflakeConfig:
    server_name: str
    database: str
    schema: str
    staging_bucket_name: str
    storage_integration_name: str
    table: str = "SUPERSTORE_SALES"
    warehouse: Optional[str] = None
    role: Optional[str] = None
    username: Optional[str] = None
    password: Optional[str] = None

    @property
    def qualified_table(self):
        return f"{self.database}.{self.schema}.{self.table}"

    @classmethod
    def from_env(cls, environ=None):
        environ = os.environ if environ is None else environ
        required = {
            "server_name": "SNOWFLAKE_SERVER_NAME",
            "database": "SNOWFLAKE_DATABASE",
            "schema": "SNOWFLAKE_SCHEMA",
            "staging_bucket_name": "SNOWFLAKE_STAGING_BUCKET",
            "storage_integration_name": "SNOWFLAKE_STORAGE_INTEGRATION",
        }
        missing = [var for var in required.values() if not environ.get(var)]
        if missing:
            raise ConfigurationError(
                f"Missing Snowflake settings: {', '.join(missing)}"
            )

        return cls(
            **{field: environ[var] for field, var in required.items()},
            table=environ.get("SNOWFLAKE_TABLE", "SUPERSTORE_SALES"),
            warehouse=environ.get("SNOWFLAKE_WAREHOUSE"),
            role=environ.get("SNOWFLAKE_ROLE"),
            username=environ.get("SNOWFLAKE_USER"),
            password=environ.get("SNOWFLAKE_PASSWORD"),
        )


@dataclass
class PipelineConfig:
    input_path: str
    output_dir: str
    on_date_error: str = DateErrorPolicy.SKIP.value
    output_format: str = "csv"
    write_rejects: bool = False
    write_summary: bool = False
    snowflake: Optional[SnowflakeConfig] = None

    @property
    def date_error_policy(self):
        return DateErrorPolicy.parse(self.on_date_error)

    @property
    def enriched_output(self):
        return f"{self.output_dir.rstrip('/')}/enriched_sales.{self.output_format}"

    @property
    def rejects_output(self):
        return f"{self.output_dir.rstrip('/')}/rejected_sales.csv"

    @property
    def summary_output(self):
        return f"{self.output_dir.rstrip('/')}/monthly_summary.csv"

    @property
    def expected_outputs(self):
        outputs = [self.enriched_output]
        if self.write_rejects:
            outputs.append(self.rejects_output)
        if self.write_summary:
            outputs.append(self.summary_output)
        return outputs

    def validate(self):
        if not self.input_path:
            raise ConfigurationError("input_path is required")
        if not self.output_dir:
            raise ConfigurationError("output_dir is required")
        if self.output_format not in OUTPUT_FORMATS:
            raise ConfigurationError(
                f"Invalid output_format '{self.output_format}', expected one of: {', '.join(OUTPUT_FORMATS)}"
            )
        DateErrorPolicy.parse(self.on_date_error)
        return self

    @classmethod
    def from_env(cls, environ=None):
        """Load settings from SUPERSTORE_* variables.

        When SUPERSTORE_INPUT_PATH is not set, the input is the blob
        SUPERSTORE_INPUT_BLOB in AZURE_STORAGE_ACCOUNT/AZURE_STORAGE_CONTAINER.
        """
        environ = os.environ if environ is None else environ
        input_path = environ.get("SUPERSTORE_INPUT_PATH")
        if not input_path:
            account = environ.get("AZURE_STORAGE_ACCOUNT")
            container = environ.get("AZURE_STORAGE_CONTAINER")
            if account and container:
                blob = environ.get("SUPERSTORE_INPUT_BLOB", "superstore_sales.csv")
                input_path = f"azfs://{account}/{container}/{blob}"

        return cls(
            input_path=input_path or "",
            output_dir=environ.get("SUPERSTORE_OUTPUT_DIR", ""),
            on_date_error=environ.get("SUPERSTORE_ON_DATE_ERROR", DateErrorPolicy.SKIP.value),
            output_format=environ.get("SUPERSTORE_OUTPUT_FORMAT", "csv"),
            write_rejects=_env_flag(environ, "SUPERSTORE_WRITE_REJECTS"),
            write_summary=_env_flag(environ, "SUPERSTORE_WRITE_SUMMARY"),
            snowflake=SnowflakeConfig.from_env(environ) if _env_flag(environ, "SUPERSTORE_LOAD_SNOWFLAKE") else None,
        )
