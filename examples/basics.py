from bindery import Binding, Emitter, ReactiveAggregate, ReactiveStore

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Emitting events")
print("-" * 100)
print()

# Any object can raise named events by inheriting from Emitter.
button = Emitter()
log_click = lambda x, y: print(f"Clicked at ({x}, {y})")

button.add_event_listener("click", log_click)
button.dispatch_event("click", 10, 20)

button.remove_event_listener("click", log_click)
button.dispatch_event("click", 30, 40)  # Nobody listens anymore

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Defining a store")
print("-" * 100)
print()


# Keys come from defaults, merged with whatever the constructor receives.
class Person(ReactiveStore):
    defaults = {"name": "Alice", "age": 30}


person = Person({"age": 31})

# Every write fires the generic change event, then the key event.
person.add_event_listener(ReactiveStore.CHANGE, lambda key, value: print(f"{key} -> {value}"))
unsubscribe = person.subscribe("name", lambda name: print(f"Hello, {name}!"))

person.name = "Bob"
person.age = 32

unsubscribe()
person.name = "Carol"  # Only the change event fires now

# Stores iterate over their current values.
print(list(person))

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Aggregates")
print("-" * 100)
print()

people = ReactiveAggregate([person, Person({"name": "Dan"})])

people.add_event_listener(ReactiveAggregate.LENGTH, lambda: print(f"Now {len(people)} people"))
people.add_event_listener(
    ReactiveAggregate.CHANGE,
    lambda index, key, value: print(f"people[{index}].{key} = {value!r}"),
)

people[1].age = 40
people.push(Person({"name": "Eve"}))
people.pop()

# ------------------------------------------------------------------------------------------------

print()
print("=" * 100)
print("Binding stores together")
print("-" * 100)
print()

greeting = ReactiveStore({"text": ""})

# Whenever the name changes, read it, format it and write it into the greeting.
binding = Binding(
    [
        [person, "name"],
        [person, "name", person, "age"],
        [lambda values: f"{values[0]} ({values[1]})"],
        [greeting, "text"],
    ]
)
greeting.subscribe("text", print)

person.name = "Frank"

binding.teardown()
person.name = "Grace"  # The greeting no longer follows
print(greeting.text)
