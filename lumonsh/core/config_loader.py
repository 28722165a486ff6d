"""
LUMON Shell Configuration Loader

Configuration management for the shell:
- JSON configuration file loading
- Configuration validation
- Default value handling
- Runtime configuration updates

Author: LUMON Shell Developers
Version: 1.0.0
"""

import json
import threading
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from lumonsh.exceptions import ConfigLoadError, ConfigValidationError
from lumonsh.logger import LogLevel


DEFAULT_CONFIG_PATH = str(Path(__file__).resolve().parent.parent / 'config.json')


@dataclass
class ShellConfig:
    """Prompt loop settings."""
    prompt: str = "LUMON OS> "
    banner: str = "Starting LUMON Shell"
    exit_command: str = "exit"
    max_line_length: int = 1023


@dataclass
class ParserConfig:
    """Segment parser settings."""
    max_args: int = 8


@dataclass
class ExecConfig:
    """Process creation and path resolution settings."""
    command_root: str = "c"
    program_fd: int = 6
    file_mode: int = 0o644


@dataclass
class LoggingConfig:
    """Logging configuration settings."""
    level: str = "WARNING"
    log_file: Optional[str] = None
    console_output: bool = True


@dataclass
class Config:
    """
    Main configuration container.

    Holds every configuration section of the shell.
    """
    shell: ShellConfig = field(default_factory=ShellConfig)
    parser: ParserConfig = field(default_factory=ParserConfig)
    execution: ExecConfig = field(default_factory=ExecConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)


class ConfigLoader:
    """
    Configuration loader and manager.

    Example:
        >>> loader = ConfigLoader()
        >>> config = loader.load('config.json')
        >>> print(config.execution.command_root)
        c
    """

    _instance: Optional['ConfigLoader'] = None
    _lock = threading.Lock()

    def __new__(cls) -> 'ConfigLoader':
        """Singleton pattern for configuration access."""
        with cls._lock:
            if cls._instance is None:
                cls._instance = super().__new__(cls)
                cls._instance._config = Config()
                cls._instance._loaded = False
            return cls._instance

    def load(self, config_path: str) -> Config:
        """
        Load configuration from a JSON file.

        Args:
            config_path: Path to the configuration file

        Returns:
            Config object with loaded settings

        Raises:
            ConfigLoadError: If the file cannot be loaded or parsed
            ConfigValidationError: If a value is out of range
        """
        path = Path(config_path)

        if not path.exists():
            raise ConfigLoadError(
                f"Configuration file not found: {config_path}",
                path=config_path
            )

        try:
            with open(path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except json.JSONDecodeError as e:
            raise ConfigLoadError(
                f"Invalid JSON in configuration file: {e}",
                path=config_path
            )
        except OSError as e:
            raise ConfigLoadError(
                f"Cannot read configuration file: {e}",
                path=config_path
            )

        config = self._parse_config(data)
        self._validate(config)
        self._config = config
        self._loaded = True
        return self._config

    def load_dict(self, data: dict[str, Any]) -> Config:
        """Load configuration from an already-parsed mapping."""
        config = self._parse_config(data)
        self._validate(config)
        self._config = config
        self._loaded = True
        return self._config

    def _parse_config(self, data: dict[str, Any]) -> Config:
        """Parse configuration data into Config object."""
        config = Config()

        if 'shell' in data:
            shell_data = data['shell']
            config.shell = ShellConfig(
                prompt=shell_data.get('prompt', config.shell.prompt),
                banner=shell_data.get('banner', config.shell.banner),
                exit_command=shell_data.get('exit_command', config.shell.exit_command),
                max_line_length=shell_data.get('max_line_length', config.shell.max_line_length),
            )

        if 'parser' in data:
            parser_data = data['parser']
            config.parser = ParserConfig(
                max_args=parser_data.get('max_args', config.parser.max_args),
            )

        if 'execution' in data:
            exec_data = data['execution']
            file_mode = exec_data.get('file_mode', config.execution.file_mode)
            if isinstance(file_mode, str):
                try:
                    file_mode = int(file_mode, 8)
                except ValueError:
                    raise ConfigValidationError(
                        f"file_mode must be an octal string: {file_mode!r}",
                        key='execution.file_mode'
                    ) from None
            config.execution = ExecConfig(
                command_root=exec_data.get('command_root', config.execution.command_root),
                program_fd=exec_data.get('program_fd', config.execution.program_fd),
                file_mode=file_mode,
            )

        if 'logging' in data:
            log_data = data['logging']
            config.logging = LoggingConfig(
                level=log_data.get('level', config.logging.level),
                log_file=log_data.get('log_file', config.logging.log_file),
                console_output=log_data.get('console_output', config.logging.console_output),
            )

        return config

    @staticmethod
    def _validate(config: Config) -> None:
        """Reject values the engine cannot work with."""
        if config.parser.max_args < 1:
            raise ConfigValidationError(
                "max_args must be at least 1", key='parser.max_args'
            )
        # 0, 1 and 2 are the standard streams the children remap.
        if config.execution.program_fd < 3:
            raise ConfigValidationError(
                "program_fd must not be a standard stream", key='execution.program_fd'
            )
        if not config.execution.command_root or config.execution.command_root.strip('/') == '':
            raise ConfigValidationError(
                "command_root must name a directory", key='execution.command_root'
            )
        if not config.shell.exit_command.strip():
            raise ConfigValidationError(
                "exit_command must not be blank", key='shell.exit_command'
            )
        if config.shell.max_line_length < 1:
            raise ConfigValidationError(
                "max_line_length must be positive", key='shell.max_line_length'
            )
        if config.logging.level.upper() not in LogLevel.__members__:
            raise ConfigValidationError(
                f"Unknown log level: {config.logging.level}", key='logging.level'
            )

    @property
    def config(self) -> Config:
        """Get the current configuration."""
        if not self._loaded:
            return Config()
        return self._config

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a configuration value by dot-notation key.

        Args:
            key: Dot-notation key (e.g., 'execution.command_root')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        parts = key.split('.')
        obj: Any = self.config

        for part in parts:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                return default

        return obj

    def set(self, key: str, value: Any) -> None:
        """
        Set a configuration value at runtime.

        Changes are not persisted to disk.
        """
        if not self._loaded:
            self._config = Config()
            self._loaded = True

        parts = key.split('.')
        obj: Any = self._config

        for part in parts[:-1]:
            if hasattr(obj, part):
                obj = getattr(obj, part)
            else:
                raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        final_key = parts[-1]
        if not hasattr(obj, final_key):
            raise ConfigValidationError(f"Invalid configuration key: {key}", key=key)

        previous = getattr(obj, final_key)
        setattr(obj, final_key, value)
        try:
            self._validate(self._config)
        except ConfigValidationError:
            setattr(obj, final_key, previous)
            raise

    def reset(self) -> None:
        """Drop any loaded configuration and go back to defaults."""
        self._config = Config()
        self._loaded = False

    def to_dict(self) -> dict[str, Any]:
        """Convert configuration to dictionary."""
        def dataclass_to_dict(obj: Any) -> Any:
            if hasattr(obj, '__dataclass_fields__'):
                return {
                    k: dataclass_to_dict(v)
                    for k, v in obj.__dict__.items()
                }
            elif isinstance(obj, list):
                return [dataclass_to_dict(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: dataclass_to_dict(v) for k, v in obj.items()}
            else:
                return obj

        return dataclass_to_dict(self.config)


def get_config() -> Config:
    """
    Get the global configuration instance.

    Returns:
        Config object with current settings
    """
    loader = ConfigLoader()
    return loader.config
