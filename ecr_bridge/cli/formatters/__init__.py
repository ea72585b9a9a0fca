from ecr_bridge.cli.formatters.result_formatter import format_outcome, format_parsed_error

__all__ = ["format_outcome", "format_parsed_error"]
