"""Foundation layer: diagnostics, the Result monad, and configuration."""
