"""Go source templates extracted by the component generators."""
