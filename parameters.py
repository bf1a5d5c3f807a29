from common.errors import ConfigError

max_cities = 64          # visited set must fit a 64-bit mask
max_name_length = 511
max_table_bytes = 1 << 30
log_level = 'WARNING'


class SolverParameters:
    def __init__(self,
                 max_cities=max_cities,
                 max_name_length=max_name_length,
                 max_table_bytes=max_table_bytes,
                 log_level=log_level):
        if not 1 <= max_cities <= 64:
            raise ConfigError(f'max_cities must be within [1, 64], got {max_cities}')
        if max_name_length < 1:
            raise ConfigError(f'max_name_length must be positive, got {max_name_length}')
        if max_table_bytes < 1:
            raise ConfigError(f'max_table_bytes must be positive, got {max_table_bytes}')

        self.max_cities = int(max_cities)
        self.max_name_length = int(max_name_length)
        self.max_table_bytes = int(max_table_bytes)
        self.log_level = str(log_level).upper()

    def as_dict(self):
        return {'max_cities': self.max_cities,
                'max_name_length': self.max_name_length,
                'max_table_bytes': self.max_table_bytes,
                'log_level': self.log_level}

    def __repr__(self):
        return 'SolverParameters({})'.format(
            ', '.join(f'{k}={v!r}' for k, v in self.as_dict().items()))

