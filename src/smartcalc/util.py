from functools import wraps


class CalcError(Exception):
    pass


class EvalError(CalcError):
    '''
    Expression could not be turned into a number.
    '''


class ExpressionSyntaxError(EvalError):
    '''
    Malformed expression: bad character, unbalanced parentheses, dangling
    operator, or tokens left over after a complete expression.
    '''


class DivisionByZero(EvalError):
    pass


class PersistenceError(CalcError):
    '''
    Loading from or saving to a persistence gateway failed.
    '''


def wrap_persistence_errors(fmt):
    '''
    Decorator that converts I/O and decoding failures to PersistenceErrors.

    Passes through PersistenceErrors. The message is formatted with the
    wrapped function's arguments.
    '''
    def decorator(f):
        @wraps(f)
        def wrapper(*args, **kwargs):
            try:
                return f(*args, **kwargs)
            except PersistenceError:
                raise
            except (OSError, ValueError, TypeError) as e:
                raise PersistenceError(fmt.format(*args, **kwargs), e) from e
        return wrapper
    return decorator
