from __future__ import annotations

from dataclasses import dataclass

@dataclass(frozen=True)
class ComplexNumber:
    re: float
    im: float

    @classmethod
    def from_complex(cls, z: complex) -> "ComplexNumber":
        return cls(float(z.real), float(z.imag))

    def to_complex(self) -> complex:
        return complex(self.re, self.im)

    def __add__(self, other: "ComplexNumber") -> "ComplexNumber":
        return add(self, other)

    def __mul__(self, other: "ComplexNumber") -> "ComplexNumber":
        return multiply(self, other)

    def norm_squared(self) -> float:
        return norm_squared(self)

def add(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return ComplexNumber(a.re + b.re, a.im + b.im)

def multiply(a: ComplexNumber, b: ComplexNumber) -> ComplexNumber:
    return ComplexNumber(a.re * b.re - a.im * b.im, a.re * b.im + a.im * b.re)

def norm_squared(a: ComplexNumber) -> float:
    # |a|^2 without the square root
    return a.re * a.re + a.im * a.im
