"""View models: filter state, tooltip state machine and the chart controller."""
