"""HTTP transport and resource accessors for the Vend API."""
