from windmix.setups.wind_mixing.wind_mixing import WindMixingSetup  # noqa: F401
