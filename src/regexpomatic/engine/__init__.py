"""Processing engine.

- compiler: configuration strings -> regexes and tag templates
- splitter: payload fan-out
- extractor: named capture groups and match counting
- emission: keep/drop policy
- templater: sandboxed Jinja2 tag templates
- router: rule chain and gate routing
- processor: the process() entry point
- cache: optional compiled-configuration cache
"""
