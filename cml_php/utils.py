from cml_php.language import (
    get_model_aggregates,
    get_model_entities,
    get_model_enums,
    get_model_value_objects,
)


def _property_str(prop) -> str:
    type_str = f"Set<{prop.type}>" if prop.is_collection else prop.type
    bits = [type_str]
    if prop.is_relation:
        bits.insert(0, "-")
    if prop.is_enum:
        bits.append("^")
    if prop.nullable:
        bits.append("nullable")
    return " ".join(bits)


def model_summary(model) -> dict:
    return {
        "bounded_contexts": len(model.bounded_contexts),
        "aggregates": len(get_model_aggregates(model)),
        "entities": len(get_model_entities(model)),
        "value_objects": len(get_model_value_objects(model)),
        "enums": len(get_model_enums(model)),
    }


def print_model_debug(model):
    summary = model_summary(model)

    print("=== SUMMARY ===")
    print(
        f"Bounded Contexts: {summary['bounded_contexts']} | Aggregates: {summary['aggregates']}"
    )
    print(
        f"Entities: {summary['entities']} | Value Objects: {summary['value_objects']} "
        f"| Enums: {summary['enums']}\n"
    )

    for bc in model.bounded_contexts:
        print(f"=== BOUNDED CONTEXT {bc.name or '<unnamed>'} ===")
        if not bc.aggregates:
            print("  (no aggregates)")
        for agg in bc.aggregates:
            print(f"- Aggregate {agg.name}")

            for enum_def in agg.enums:
                values = ", ".join(enum_def.values) if enum_def.values else "(no values)"
                print(f"    enum {enum_def.name}: {values}")

            for vo in agg.value_objects:
                print(f"    ValueObject {vo.name}")
                if not vo.properties:
                    print("        (no properties)")
                for p in vo.properties:
                    print(f"        • {p.name}: {_property_str(p)}")

            for entity in agg.entities:
                root = " (aggregate root)" if entity.is_aggregate_root else ""
                print(f"    Entity {entity.name}{root}")
                if not entity.properties:
                    print("        (no properties)")
                for p in entity.properties:
                    print(f"        • {p.name}: {_property_str(p)}")
        print()
