"""logpurify

Pre-emission redaction layer for text-producing systems (log lines,
exception messages, key/value fragments).

Public API surface:
- logpurify.detect.redact.RedactionEngine : run detectors, merge spans, rewrite text
- logpurify.detect.registry.build_pipeline : assemble detectors in canonical order
- logpurify.policies.loader : load YAML policies and build engines
- logpurify.sanitize.MessageSanitizer : apply dry-run / mask / strict modes
- logpurify.cli.main : CLI entrypoint

Detectors are stateless after construction, so one engine can be shared by
any number of threads.
"""
__all__ = ["__version__"]
__version__ = "0.3.0"
