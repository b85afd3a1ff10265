import jax

# The samplers are compared against float64 densities.
jax.config.update("jax_enable_x64", True)
