from apps.catalog.services.image_matching import (
    combination_pairs,
    images_for_selection,
    is_general,
    matches_selection,
)

COLOR, SIZE = 1, 2
RED, BLUE, GREEN = 10, 11, 12
SMALL, MEDIUM = 20, 21


def image(name, *pairs):
    return {
        'name': name,
        'attribute_combination': [
            {'attribute_id': attribute_id, 'attribute_value_id': value_id}
            for attribute_id, value_id in pairs
        ] or None,
    }


def names(images):
    return [img['name'] for img in images]


GALLERY = [
    image('front'),
    image('red', (COLOR, RED)),
    image('back'),
    image('blue', (COLOR, BLUE)),
    image('red-small', (COLOR, RED), (SIZE, SMALL)),
]


class TestCombinationPairs:
    def test_accepts_dicts_and_tuples(self):
        stored = [{'attribute_id': '1', 'attribute_value_id': 10}]
        assert combination_pairs(stored) == {(1, 10)}
        assert combination_pairs([(1, 10), [2, 20]]) == {(1, 10), (2, 20)}

    def test_empty_values(self):
        assert combination_pairs(None) == set()
        assert combination_pairs([]) == set()


class TestMatchesSelection:
    def test_general_image_matches_anything(self):
        assert matches_selection(image('front'), [])
        assert matches_selection(image('front'), [(COLOR, RED)])

    def test_tagged_image_needs_a_selection(self):
        assert not matches_selection(image('red', (COLOR, RED)), [])
        assert not matches_selection(image('red', (COLOR, RED)), None)

    def test_all_tagged_pairs_must_be_selected(self):
        red_small = image('red-small', (COLOR, RED), (SIZE, SMALL))
        assert not matches_selection(red_small, [(COLOR, RED)])
        assert not matches_selection(red_small, [(COLOR, RED), (SIZE, MEDIUM)])
        assert matches_selection(red_small, [(COLOR, RED), (SIZE, SMALL)])

    def test_extra_selected_attributes_are_ignored(self):
        assert matches_selection(image('red', (COLOR, RED)), [(COLOR, RED), (SIZE, MEDIUM)])

    def test_value_id_alone_is_not_enough(self):
        # Same value id on another attribute axis
        assert not matches_selection(image('red', (COLOR, RED)), [(SIZE, RED)])

    def test_empty_stored_combination_is_general(self):
        assert is_general({'attribute_combination': []})
        assert is_general({'attribute_combination': None})


class TestImagesForSelection:
    def test_no_selection_returns_general_images(self):
        assert names(images_for_selection(GALLERY, [])) == ['front', 'back']

    def test_matching_tagged_images_replace_general_ones(self):
        assert names(images_for_selection(GALLERY, [(COLOR, BLUE)])) == ['blue']

    def test_unmatched_selection_falls_back_to_general(self):
        assert names(images_for_selection(GALLERY, [(COLOR, GREEN)])) == ['front', 'back']
        assert names(images_for_selection(GALLERY, [(SIZE, MEDIUM)])) == ['front', 'back']

    def test_keeps_input_order(self):
        selection = [(SIZE, SMALL), (COLOR, RED)]
        assert names(images_for_selection(GALLERY, selection)) == ['red', 'red-small']

    def test_accepts_dict_selection(self):
        selection = [{'attribute_id': COLOR, 'attribute_value_id': RED}]
        assert names(images_for_selection(GALLERY, selection)) == ['red']

    def test_no_general_images(self):
        tagged_only = [image('red', (COLOR, RED))]
        assert images_for_selection(tagged_only, []) == []
        assert images_for_selection(tagged_only, [(COLOR, BLUE)]) == []

    def test_empty_gallery(self):
        assert images_for_selection([], [(COLOR, RED)]) == []
