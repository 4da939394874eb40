"""
invokekit constants for the generated bridge bindings
"""

DO_NOT_EDIT = (
    "// This file was generated by [invokekit](https://github.com/invokekit/invokekit). "
    "Do not edit this file manually."
)

ESLINT_DISABLE = "/* eslint-disable */\n"


class BridgeRuntime:
    """Names the generated code expects the host webview to provide"""
    
    INVOKE_GLOBAL = "__TAURI_INVOKE__"
    INVOKE_BINDING = "invoke"
    
    @classmethod
    def binding_statement(cls) -> str:
        """Local binding every generated file calls through"""
        return f"const {cls.INVOKE_BINDING} = window.{cls.INVOKE_GLOBAL};"


class GenerationPaths:
    """Standard names for generated and configuration files"""
    
    CONFIG_FILE = "invokekit.config.json"
    
    TYPESCRIPT_BINDINGS = "bindings.ts"
    JAVASCRIPT_BINDINGS = "bindings.js"


COMMON_TYPE_MAP = {
    "UUID": "string",
    "Decimal": "number",
    "datetime": "string",
    "date": "string",
    "time": "string",
    "Path": "string",
    "EmailStr": "string",
    "HttpUrl": "string",
}
