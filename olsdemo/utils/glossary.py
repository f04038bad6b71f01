# Centralized tooltip/help text used across the app.

METRIC_TOOLTIPS = {
    "n": "Number of observations in the current sample.",
    "Slope": "OLS estimate of β₁. Consistency means it approaches the true slope as n grows.",
    "Intercept": "OLS estimate of β₀, the fitted value of y at x = 0.",
    "R²": "Share of the variation in y explained by the fitted line (1 − SSres / SStot).",
    "SE": "Standard error of the slope, sqrt(σ̂² / Sxx). Shrinks roughly like 1/√n.",
}

SAMPLING_MODE_HELP = (
    "Cumulative: keep every past point and add a new batch each tick.\n"
    "Independent: draw a completely fresh sample of the new size each tick."
)

CONSISTENCY_URL = "https://en.wikipedia.org/wiki/Consistent_estimator"
