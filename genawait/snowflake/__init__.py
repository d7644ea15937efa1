from .snowflake import Snowflake as Snowflake
from .snowflake_generator import SnowflakeGenerator as SnowflakeGenerator
