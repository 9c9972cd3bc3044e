"""
Configuration module providing pipeline settings through PipelineConfig and SnowflakeConfig classes.
"""


from .pipeline_config import PipelineConfig, SnowflakeConfig

# Export the config classes as the public interface of this package
__all__ = ['PipelineConfig', 'SnowflakeConfig']
