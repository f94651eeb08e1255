from typing import Any


# Type aliases for Python dictionaries
type LambdaEvent = dict[str, Any]
type LambdaContext = Any
type LambdaResponse = dict[str, Any]
type AppConfiguration = dict[str, Any]
type HttpHeaders = dict[str, str]
