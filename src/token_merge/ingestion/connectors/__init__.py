"""HTTP connectors."""
