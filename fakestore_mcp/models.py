"""Shapes of the resources returned by the Fake Store API.

These are typing aids only. Payloads are relayed exactly as the API
returns them and are never validated against these shapes.
"""

from typing import TypedDict


class Rating(TypedDict):
    rate: float
    count: int


class Product(TypedDict):
    id: int
    title: str
    price: float
    description: str
    category: str
    image: str
    rating: Rating


class CartItem(TypedDict):
    productId: int
    quantity: int


class Cart(TypedDict):
    id: int
    userId: int
    date: str
    products: list[CartItem]


class Geolocation(TypedDict):
    lat: str
    long: str


class Address(TypedDict):
    street: str
    number: int
    city: str
    zipcode: str
    geolocation: Geolocation


class Name(TypedDict):
    firstname: str
    lastname: str


class User(TypedDict, total=False):
    id: int
    email: str
    username: str
    password: str
    name: Name
    address: Address
    phone: str
